# /*******************************************************************************
# * Copyright (c) 15.03.2013 Aaron Digulla.
# * All rights reserved. This program and the accompanying materials
# * are made available under the terms of the Eclipse Public License v1.0
# * which accompanies this distribution, and is available at
# * http://www.eclipse.org/legal/epl-v10.html
# *
# * Contributors:
# *    Aaron Digulla - initial API and implementation and/or initial documentation
# *******************************************************************************/
'''
Turn Maven source JARs into Eclipse source bundles

Eclipse only attaches sources to a plug-in when they come as an OSGi bundle
which points back to the binary bundle with the Eclipse-SourceBundle header.
For each artifact, this code looks for the attached source JAR
(junit-4.11-sources.jar) and writes a copy with an OSGi manifest next to it
(junit-4.11-sources-bundle.jar).

Created on Mar 15, 2013

@author: Aaron Digulla <digulla@hepe.com>
'''

import os
import os.path
import zlib
import zipfile
import logging

from pdetarget.common import SerializationError
from pdetarget.buildcontext import DefaultBuildContext
from pdetarget.manifest import Manifest, MANIFEST_NAME, parseManifest, formatManifest, overlay

log = logging.getLogger('pdetarget.sourcebundle')

BUNDLE_ID_KEY = 'Bundle-SymbolicName'
BUNDLE_VERSION_KEY = 'Bundle-Version'
BUNDLE_VENDOR_KEY = 'Bundle-Vendor'
BUNDLE_NAME_KEY = 'Bundle-Name'
BUNDLE_MANIFEST_VERSION_KEY = 'Bundle-ManifestVersion'
SOURCE_BUNDLE_KEY = 'Eclipse-SourceBundle'

CREATED = 'created'
EXISTS = 'exists'
SKIPPED = 'skipped'

class UnreadableArchive(Exception):
    '''An input JAR can't be opened or its manifest can't be parsed'''
    pass

def sourceBundleFile(sourcesFile):
    '''junit-4.11-sources.jar -> junit-4.11-sources-bundle.jar'''
    dir, name = os.path.split(sourcesFile)
    if name.endswith('.jar'):
        name = name[:-4]
    return os.path.join(dir, '%s-bundle.jar' % name)

def symbolicName(value):
    '''Strip directives like ";singleton:=true" from a Bundle-SymbolicName'''
    return value.split(';', 1)[0].strip()

def sourceReference(bundleId, bundleVersion):
    return '%s;version="%s";roots:="."' % (bundleId, bundleVersion)

def sourceBundleAttributes(bundleId, bundleVersion, bundleVendor=None, bundleName=None):
    '''The OSGi headers which turn a source JAR into a source bundle of bundleId'''
    attrs = {
        BUNDLE_ID_KEY: '%s.source' % bundleId,
        BUNDLE_VERSION_KEY: bundleVersion,
        BUNDLE_MANIFEST_VERSION_KEY: '2',
    }

    if bundleVendor is not None:
        attrs[BUNDLE_VENDOR_KEY] = bundleVendor

    if bundleName is not None:
        attrs[BUNDLE_NAME_KEY] = '%s Source' % bundleName

    # mark this bundle as a source for the main artifact
    attrs[SOURCE_BUNDLE_KEY] = sourceReference(bundleId, bundleVersion)
    return attrs

def readManifest(path):
    '''Read the manifest of a JAR or of an unpacked JAR (a directory).

    Returns None if there is no manifest.'''
    try:
        if os.path.isdir(path):
            manifestFile = os.path.join(path, *MANIFEST_NAME.split('/'))
            if not os.path.isfile(manifestFile):
                return None
            with open(manifestFile, 'rb') as fh:
                data = fh.read()
        else:
            with zipfile.ZipFile(path) as zf:
                try:
                    data = zf.read(MANIFEST_NAME)
                except KeyError:
                    return None

        return parseManifest(data)
    except (OSError, zipfile.BadZipFile, ValueError) as e:
        raise UnreadableArchive('%s: %s' % (path, e)) from e

def jarEntries(zf, exclude=MANIFEST_NAME):
    '''Yield (name, bytes) for all entries of an open JAR except one'''
    for info in zf.infolist():
        if info.filename == exclude:
            continue

        try:
            data = zf.read(info)
        except (OSError, zipfile.BadZipFile, zlib.error, EOFError) as e:
            raise UnreadableArchive('%s: %s' % (zf.filename, e)) from e

        yield info.filename, data

def writeJar(out, manifest, entries):
    '''Write a new JAR with the manifest as first entry followed by entries'''
    with zipfile.ZipFile(out, 'w', compression=zipfile.ZIP_DEFLATED) as zf:
        zf.writestr(MANIFEST_NAME, formatManifest(manifest))

        seen = set([MANIFEST_NAME])
        for name, data in entries:
            if name in seen:
                log.warning('Skipping duplicate entry %s' % name)
                continue
            seen.add(name)

            # A fresh entry; the compressed size of the original doesn't apply anymore
            zf.writestr(name, data)

class SourceBundlePackager(object):
    '''Create source bundles for artifacts'''
    def __init__(self, buildContext=None):
        self.buildContext = buildContext if buildContext is not None else DefaultBuildContext()
        self.counts = {CREATED: 0, EXISTS: 0, SKIPPED: 0}

    def run(self, artifacts):
        for artifact in artifacts:
            result = self.createSourceBundle(artifact)
            self.counts[result] += 1

        log.info('Source bundles: %d created, %d already existed, %d skipped' % (
            self.counts[CREATED], self.counts[EXISTS], self.counts[SKIPPED]))

    def createSourceBundle(self, artifact):
        sourcesFile = artifact.sourcesFile()
        if not os.path.exists(sourcesFile):
            log.warning('Sources jar is missing for artifact %s at %s' % (artifact.key(), sourcesFile))
            return SKIPPED

        bundleFile = sourceBundleFile(sourcesFile)
        if os.path.exists(bundleFile):
            log.info('Skipping: sources bundle already generated for artifact %s at %s' % (artifact.key(), bundleFile))
            return EXISTS

        # read bundle information from the artifact's manifest
        try:
            manifest = readManifest(artifact.file)
        except UnreadableArchive as e:
            log.warning("Can't read the manifest of artifact %s: %s" % (artifact.key(), e))
            return SKIPPED

        if manifest is None:
            log.warning('Manifest is missing for artifact %s at %s' % (artifact.key(), artifact.file))
            return SKIPPED

        bundleId = manifest.get(BUNDLE_ID_KEY)
        if bundleId is None:
            log.warning('Bundle symbolic name cannot be resolved for %s' % artifact.key())
            return SKIPPED

        bundleVersion = manifest.get(BUNDLE_VERSION_KEY)
        if bundleVersion is None:
            log.warning('Bundle version cannot be resolved for %s' % artifact.key())
            return SKIPPED

        attrs = sourceBundleAttributes(symbolicName(bundleId), bundleVersion.strip(),
            manifest.get(BUNDLE_VENDOR_KEY), manifest.get(BUNDLE_NAME_KEY))

        try:
            self.packageSources(sourcesFile, attrs, bundleFile)
        except UnreadableArchive as e:
            log.warning("Can't read the sources jar of artifact %s: %s" % (artifact.key(), e))
            return SKIPPED

        log.info('Created source bundle %s' % bundleFile)
        return CREATED

    def packageSources(self, sourcesFile, attrs, bundleFile):
        '''Copy the sources JAR with an overlaid manifest'''
        try:
            sourceJar = zipfile.ZipFile(sourcesFile)
        except (OSError, zipfile.BadZipFile) as e:
            raise UnreadableArchive('%s: %s' % (sourcesFile, e)) from e

        with sourceJar:
            try:
                data = sourceJar.read(MANIFEST_NAME)
            except KeyError:
                data = None

            try:
                sourceManifest = parseManifest(data) if data else Manifest()
            except ValueError as e:
                raise UnreadableArchive('%s: %s' % (sourcesFile, e)) from e

            sourceManifest.mainAttributes = overlay(sourceManifest.mainAttributes, attrs)

            try:
                with self.buildContext.newFileOutputStream(bundleFile) as out:
                    writeJar(out, sourceManifest, jarEntries(sourceJar))
            except UnreadableArchive:
                removePartialFile(bundleFile)
                raise
            except OSError as e:
                removePartialFile(bundleFile)
                raise SerializationError("Can't write source bundle %s: %s" % (bundleFile, e)) from e

def removePartialFile(path):
    if os.path.exists(path):
        os.remove(path)
