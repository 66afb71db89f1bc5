# /*******************************************************************************
# * Copyright (c) 07.04.2011 Aaron Digulla.
# * All rights reserved. This program and the accompanying materials
# * are made available under the terms of the Eclipse Public License v1.0
# * which accompanies this distribution, and is available at
# * http://www.eclipse.org/legal/epl-v10.html
# *
# * Contributors:
# *    Aaron Digulla - initial API and implementation and/or initial documentation
# *******************************************************************************/
'''
Read the direct dependencies of a POM

Only the <dependencies> of the POM itself are used; there is no
transitive resolution and no inheritance from parent POMs.

Created on Apr 7, 2011

@author: Aaron Digulla <digulla@hepe.com>
'''

import re
import logging
from lxml import etree, objectify

from pdetarget.common import ConfigurationError, MalformedInputError
from pdetarget.artifacts import ResolvedArtifact, repositoryPath, defaultLocalRepository

log = logging.getLogger('pdetarget.pom')

POM_NS = 'http://maven.apache.org/POM/4.0.0'
POM_NS_PREFIX = '{%s}' % POM_NS

PROPERTY_PATTERN = re.compile(r'\$\{([^}]+)\}')

def text(elem, child=None):
    '''Get the text of an XML element or None if the element or the child doesn't exist'''
    if elem is None:
        return None

    if child:
        elem = getattr(elem, child, None)

    return None if elem is None else elem.text

def addFields(cls, *fields):
    '''Add read access for text elements in a DOM to a class'''
    for field in fields:
        def getter(self, field=field):
            return self._resolve(text(self.xml(), field))

        setattr(cls, field, property(getter))

class Dependency(object):
    '''This class maps the standard fields of a Maven 2 dependency between Python and XML'''
    def __init__(self, pomElement, properties):
        self._pomElement = pomElement
        self._properties = properties

    def __repr__(self):
        return '%s:%s:%s' % (self.groupId, self.artifactId, self.version)

    def key(self):
        return '%s:%s:%s' % (self.groupId, self.artifactId, self.version)

    def xml(self):
        return self._pomElement

    def _resolve(self, value):
        return resolveProperties(value, self._properties)

    def isConcrete(self):
        '''True if the version is neither a range nor contains unresolved properties'''
        version = self.version
        if not version:
            return False
        return not ('${' in version or version[0] in '[(' or ',' in version)

    def toArtifact(self, repoDir):
        artifact = ResolvedArtifact(self.groupId, self.artifactId, self.version,
            type=self.type, classifier=self.classifier, scope=self.scope or 'compile')
        artifact.file = repositoryPath(repoDir, artifact)
        return artifact

# Add the standard cases
addFields(Dependency, 'groupId', 'artifactId', 'version', 'type', 'classifier', 'scope')

def resolveProperties(value, properties):
    '''Replace ${name} with the value of the property; unknown properties are left alone'''
    if value is None:
        return None

    value = value.strip()

    # Properties may reference other properties
    for i in range(10):
        expanded = PROPERTY_PATTERN.sub(lambda m: properties.get(m.group(1), m.group(0)), value)
        if expanded == value:
            break
        value = expanded

    return value

class Pom(object):
    '''Helper class to work with POM files'''
    def __init__(self, pomFile=None):
        self.pomFile = pomFile

        if self.pomFile is not None:
            self.load()

            self.project = self.xml.getroot()
            if self.project is None:
                raise MalformedInputError('%s: No root element' % (self.pomFile,))
            if self.project.tag != POM_NS_PREFIX+'project':
                raise MalformedInputError('%s: Expected <project> as root element but was %s' % (self.pomFile, self.project.tag,))

    def load(self):
        try:
            # This is necessary to parse POM files with HTML entities
            parser = objectify.makeparser(resolve_entities=False, recover=True)
            self.xml = objectify.parse(self.pomFile, parser=parser)
        except etree.XMLSyntaxError as e:
            raise MalformedInputError('Error parsing %s: %s' % (self.pomFile, e)) from e
        except OSError as e:
            raise ConfigurationError("Can't read POM %s: %s" % (self.pomFile, e)) from e

    def version(self):
        version = text(self.project, 'version')
        if version is None:
            version = text(getattr(self.project, 'parent', None), 'version')
        return version

    def key(self):
        '''groupId:artifactId:version'''
        groupId = text(self.project, 'groupId')
        if groupId is None:
            groupId = text(getattr(self.project, 'parent', None), 'groupId')
        return '%s:%s:%s' % (groupId, text(self.project, 'artifactId'), self.version())

    def properties(self):
        '''The properties of this POM plus project.version'''
        result = {}

        props = getattr(self.project, 'properties', None)
        if props is not None:
            for child in props.iterchildren():
                if not isinstance(child.tag, str):
                    continue
                name = etree.QName(child).localname
                result[name] = (child.text or '').strip()

        version = self.version()
        if version:
            result['project.version'] = version
            result['pom.version'] = version

        return result

    def dependencies(self):
        '''Get a list of dependencies of this POM'''
        deps = getattr(self.project, 'dependencies', None)
        if deps is None:
            return []

        result = getattr(deps, 'dependency', None)
        if result is None:
            return []

        properties = self.properties()
        return [Dependency(d, properties) for d in result]

    def __repr__(self):
        return etree.tostring(self.xml, pretty_print=True).decode('UTF-8')

def pomArtifacts(pomFile, repoDir=None):
    '''The direct dependencies of a POM as artifacts in the local repository'''
    repoDir = repoDir or defaultLocalRepository()
    pom = Pom(pomFile)

    result = []
    for dependency in pom.dependencies():
        if not dependency.isConcrete():
            log.warning("Can't locate %s of %s: version must be concrete" % (dependency, pom.key()))
            continue

        result.append(dependency.toArtifact(repoDir))

    log.debug('Found %d dependencies in %s' % (len(result), pomFile))
    return result
