# /*******************************************************************************
# * Copyright (c) 14.03.2013 Aaron Digulla.
# * All rights reserved. This program and the accompanying materials
# * are made available under the terms of the Eclipse Public License v1.0
# * which accompanies this distribution, and is available at
# * http://www.eclipse.org/legal/epl-v10.html
# *
# * Contributors:
# *    Aaron Digulla - initial API and implementation and/or initial documentation
# *******************************************************************************/
"""Eclipse PDE Target Definition Generator

Creates an Eclipse target definition (*.target) from a base target
definition and the Maven dependencies of a project. Each dependency is
added as a directory location which points into the local Maven
repository, so Eclipse can use the JARs without a P2 repository.

Get the dependencies with

> mvn dependency:list -DoutputAbsoluteArtifactFilename=true -DoutputFile=target/deps.txt

and run

> pde-target --base-definition demo.target --dependencies target/deps.txt

Created on Mar 14, 2013

@author: Aaron Digulla <digulla@hepe.com>
"""
import os
import sys
import logging

from pdetarget.common import PdeTargetError, ConfigurationError, configLogger, mustBeFile, mustBeDirectory
from pdetarget.config import parseArguments
from pdetarget.buildcontext import DefaultBuildContext, IncrementalBuildContext
from pdetarget.artifacts import readDependencyList, onlyExisting, collectDirectories
from pdetarget.pom import pomArtifacts
from pdetarget.filters import createFilters
from pdetarget.target import TargetDefinition
from pdetarget.sourcebundle import SourceBundlePackager

VERSION = '1.0 (16.03.2013)'

log = logging.getLogger('pdetarget.tool')

class AddPomDependencies(object):
    '''Adds POM dependencies to the base target definition and writes it into a new file'''
    def __init__(self, config, buildContext=None):
        self.config = config

        if buildContext is None:
            buildContext = IncrementalBuildContext() if config.incremental else DefaultBuildContext()
        self.buildContext = buildContext

        self.filters = createFilters(config)

    def run(self, artifacts=None):
        '''Returns True if the target definition was (re)generated'''
        baseDefinition = mustBeFile(self.config.baseDefinition, 'Base target definition')
        outputFile = self.config.getOutputFile()

        # base target definition changed or the target doesn't exist yet
        if os.path.exists(outputFile) and not self.buildContext.hasDelta(baseDefinition, outputFile):
            log.info('%s is up to date' % outputFile)
            return False

        log.info('Adding POM dependencies to %s' % baseDefinition)
        self.addPomDependencies(baseDefinition, outputFile, artifacts)
        log.info('Wrote %s' % outputFile)
        return True

    def addPomDependencies(self, baseDefinition, outputFile, artifacts=None):
        target = TargetDefinition(baseDefinition)

        # Fail early when the document is unusable
        target.locations()

        if artifacts is None:
            artifacts = self.resolveDependencies()
        artifacts = onlyExisting(self.filters.filter(artifacts))

        dirs = collectDirectories(artifacts)
        log.info('Found %d dependencies in %d directories' % (len(artifacts), len(dirs)))

        if self.config.createSourceBundles:
            packager = SourceBundlePackager(self.buildContext)
            packager.run(artifacts)

        result = target.withLocations(dirs, self.config.placement)
        result.save(outputFile, self.buildContext)

    def resolveDependencies(self):
        repoDir = None
        if self.config.localRepository:
            repoDir = mustBeDirectory(self.config.localRepository, 'Local repository')

        if self.config.dependencies:
            return readDependencyList(self.config.dependencies, repoDir)

        if self.config.pom:
            return pomArtifacts(self.config.pom, repoDir)

        raise ConfigurationError('No dependencies configured; use --dependencies or --pom')

def main(name, argv):
    config = parseArguments(argv, os.path.basename(name), VERSION)

    logFile = config.getLogFile()
    try:
        configLogger(logFile, config.verbose)
    except OSError as e:
        raise ConfigurationError("Can't create log file %s: %s" % (logFile, e)) from e

    log.info('%s %s' % (name, VERSION))
    log.debug('%r' % config)

    tool = AddPomDependencies(config)
    tool.run()

def run():
    '''Entry point of the pde-target command'''
    try:
        main(sys.argv[0], sys.argv[1:])
    except PdeTargetError as e:
        log.error('%s' % e)
        return 1
    return 0

if __name__ == '__main__':
    sys.exit(run())
